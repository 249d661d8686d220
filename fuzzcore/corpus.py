"""The in-memory corpus of interesting inputs and its scheduling logic."""

import bisect
import hashlib
import math
import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Optional, Union

from fuzzcore.rng import Random

_U16_MAX = 0xFFFF
_RAND_RANGE = 2**31 - 2  # Number of distinct raw values the generator yields.


def sha1_hex(unit: bytes) -> str:
    """Return the lower-case hexadecimal SHA-1 digest of ``unit``."""
    return hashlib.sha1(bytes(unit)).hexdigest()


def _canonical(rand: Random) -> float:
    """Draw a float uniformly from ``[0, 1)`` using two raw generator values."""
    low = rand.next_raw() - 1
    high = rand.next_raw() - 1
    value = (low + high * _RAND_RANGE) / (_RAND_RANGE * _RAND_RANGE)
    if value >= 1.0:
        value = math.nextafter(1.0, 0.0)
    return value


@dataclass
class InputInfo:
    """One corpus element together with its statistics and power-schedule state."""

    unit: bytes = b""
    time_of_unit: int = 0  # Microseconds.
    sha1: str = ""
    num_features: int = 0
    num_executed_mutations: int = 0
    num_successful_mutations: int = 0
    never_reduce: bool = False
    may_delete_file: bool = False
    reduced: bool = False
    has_focus_function: bool = False
    uniq_feature_set: list[int] = field(default_factory=list)
    data_flow_trace_for_focus_function: bytes = b""
    needs_energy_update: bool = False
    energy: float = 0.0
    sum_incidence: float = 0.0
    feature_freqs: list[tuple[int, int]] = field(default_factory=list)

    def delete_feature_freq(self, idx: int) -> bool:
        """Drop the local frequency of feature ``idx``; return True if it was present."""
        pos = bisect.bisect_left(self.feature_freqs, (idx, 0))
        if pos < len(self.feature_freqs) and self.feature_freqs[pos][0] == idx:
            del self.feature_freqs[pos]
            return True
        return False

    def update_energy(
        self,
        global_number_of_features: int,
        scale_per_exec_time: bool,
        average_unit_execution_time: int,
    ) -> None:
        """Recompute the entropy-based energy of this input."""
        energy = 0.0
        sum_incidence = 0.0

        # Add-one smoothing for locally discovered features.
        for _, freq in self.feature_freqs:
            incidence = freq + 1
            energy -= incidence * math.log(incidence)
            sum_incidence += incidence

        # Add-one smoothing for locally undiscovered features (log(1) == 0).
        sum_incidence += float(global_number_of_features - len(self.feature_freqs))

        # A single locally abundant feature.
        abundant = float(self.num_executed_mutations + 1)
        energy -= abundant * math.log(abundant)
        sum_incidence += abundant

        if sum_incidence != 0:
            energy = energy / sum_incidence + math.log(sum_incidence)

        if scale_per_exec_time:
            t = self.time_of_unit
            avg = average_unit_execution_time
            if t > avg * 10:
                perf_score = 10
            elif t > avg * 4:
                perf_score = 25
            elif t > avg * 2:
                perf_score = 50
            elif t * 3 > avg * 4:
                perf_score = 75
            elif t * 4 < avg:
                perf_score = 300
            elif t * 3 < avg:
                perf_score = 200
            elif t * 2 < avg:
                perf_score = 150
            else:
                perf_score = 100
            energy *= perf_score

        self.energy = energy
        self.sum_incidence = sum_incidence

    def update_feature_frequency(self, idx: int) -> None:
        """Increment the local frequency of feature ``idx``, keeping the list sorted."""
        self.needs_energy_update = True
        pos = bisect.bisect_left(self.feature_freqs, (idx, 0))
        if pos < len(self.feature_freqs) and self.feature_freqs[pos][0] == idx:
            freq = self.feature_freqs[pos][1]
            self.feature_freqs[pos] = (idx, (freq + 1) & _U16_MAX)
        else:
            self.feature_freqs.insert(pos, (idx, 1))


@dataclass
class EntropicOptions:
    """Settings of the entropic power schedule."""

    enabled: bool
    number_of_rarest_features: int
    feature_frequency_threshold: int
    scale_per_exec_time: bool


class InputCorpus:
    """The set of inputs that each contribute at least one unique feature."""

    FEATURE_SET_SIZE = 1 << 21
    MAX_MUTATION_FACTOR = 20
    SPARSE_ENERGY_UPDATES = 100

    def __init__(self, output_corpus: str, entropic: EntropicOptions) -> None:
        self.output_corpus = output_corpus
        self.entropic = entropic
        self._inputs: list[InputInfo] = []
        self._hashes: set[str] = set()
        self._num_executed_mutations = 0
        self._num_added_features = 0
        self._num_updated_features = 0
        self._input_sizes_per_feature: dict[int, int] = {}
        self._smallest_element_per_feature: dict[int, int] = {}
        self._distribution_needs_update = True
        self._freq_of_most_abundant_rare_feature = 0
        self._global_feature_freqs: dict[int, int] = {}
        self._rare_features: list[int] = []
        self._cumulative: list[float] = []
        self._total_weight = 0.0
        self._last_positive = -1

    def __len__(self) -> int:
        return len(self._inputs)

    def __getitem__(self, idx: int) -> bytes:
        return self._inputs[idx].unit

    @property
    def inputs(self) -> tuple[InputInfo, ...]:
        """The corpus elements in insertion order."""
        return tuple(self._inputs)

    @property
    def rare_features(self) -> tuple[int, ...]:
        """The features currently tracked as rare."""
        return tuple(self._rare_features)

    def size_in_bytes(self) -> int:
        return sum(len(info.unit) for info in self._inputs)

    def num_active_units(self) -> int:
        return sum(1 for info in self._inputs if info.unit)

    def max_input_size(self) -> int:
        return max((len(info.unit) for info in self._inputs), default=0)

    def increment_num_executed_mutations(self) -> None:
        self._num_executed_mutations += 1

    def num_inputs_that_touch_focus_function(self) -> int:
        return sum(1 for info in self._inputs if info.has_focus_function)

    def num_inputs_with_data_flow_trace(self) -> int:
        return sum(1 for info in self._inputs if info.data_flow_trace_for_focus_function)

    def add_to_corpus(
        self,
        unit: bytes,
        num_features: int,
        may_delete_file: bool,
        has_focus_function: bool,
        never_reduce: bool,
        time_of_unit: int,
        feature_set: Sequence[int],
        data_flow_traces: Optional[Mapping[str, bytes]],
        base_info: Optional[InputInfo],
    ) -> InputInfo:
        """Add a non-empty input and return its record."""
        unit = bytes(unit)
        if not unit:
            raise ValueError("cannot add an empty unit to the corpus")
        if len(self._inputs) >= 2**32 - 1:
            raise OverflowError("corpus is full")
        num_rare = len(self._rare_features)
        info = InputInfo(
            unit=unit,
            time_of_unit=time_of_unit,
            sha1=sha1_hex(unit),
            num_features=num_features,
            never_reduce=never_reduce,
            may_delete_file=may_delete_file,
            has_focus_function=has_focus_function,
            uniq_feature_set=sorted(feature_set),
            needs_energy_update=False,
            energy=math.log(num_rare) if num_rare else 1.0,
            sum_incidence=float(num_rare),
        )
        self._inputs.append(info)
        self._hashes.add(info.sha1)
        if has_focus_function and data_flow_traces:
            trace = data_flow_traces.get(info.sha1)
            if trace:
                info.data_flow_trace_for_focus_function = bytes(trace)
        # Without a trace of its own, an input inherits the trace of its base.
        if not info.data_flow_trace_for_focus_function and base_info is not None:
            info.data_flow_trace_for_focus_function = (
                base_info.data_flow_trace_for_focus_function
            )
        self._distribution_needs_update = True
        return info

    def replace(self, info: InputInfo, unit: bytes) -> None:
        """Swap ``info``'s input for a strictly smaller one."""
        unit = bytes(unit)
        if not len(info.unit) > len(unit):
            raise ValueError("a replacement unit must be smaller than the original")
        self._hashes.discard(info.sha1)
        self.delete_file(info)
        info.sha1 = sha1_hex(unit)
        self._hashes.add(info.sha1)
        info.unit = unit
        info.reduced = True
        self._distribution_needs_update = True

    def has_unit(self, unit: Union[bytes, str]) -> bool:
        """Whether an input (or its SHA-1 hex digest) is in the corpus."""
        digest = unit if isinstance(unit, str) else sha1_hex(unit)
        return digest in self._hashes

    def choose_unit_to_mutate(self, rand: Random) -> InputInfo:
        info = self._inputs[self.choose_unit_idx_to_mutate(rand)]
        if not info.unit:
            raise RuntimeError("chose an evicted input")
        return info

    def choose_unit_to_cross_over_with(self, rand: Random, uniform_dist: bool) -> InputInfo:
        if not uniform_dist:
            return self.choose_unit_to_mutate(rand)
        info = self._inputs[rand.below(len(self._inputs))]
        if not info.unit:
            raise RuntimeError("chose an evicted input")
        return info

    def choose_unit_idx_to_mutate(self, rand: Random) -> int:
        """Return the index of an input drawn from the corpus distribution."""
        self._update_corpus_distribution(rand)
        if self._last_positive < 0:
            raise ValueError("no input in the corpus can be chosen")
        point = _canonical(rand) * self._total_weight
        idx = bisect.bisect_right(self._cumulative, point)
        if idx >= len(self._cumulative):
            idx = self._last_positive
        return idx

    def stats_lines(self) -> list[str]:
        """One line of statistics for each input."""
        return [
            f"  [{i: 3d} {info.sha1}] sz: {len(info.unit): 5d} "
            f"runs: {info.num_executed_mutations: 5d} "
            f"succ: {info.num_successful_mutations: 5d} "
            f"focus: {int(info.has_focus_function)}"
            for i, info in enumerate(self._inputs)
        ]

    def delete_file(self, info: InputInfo) -> None:
        """Remove ``info``'s file from the output corpus if that is allowed."""
        if self.output_corpus and info.may_delete_file:
            path = os.path.join(self.output_corpus, info.sha1)
            try:
                os.remove(path)
            except OSError:
                pass

    def delete_input(self, idx: int) -> None:
        """Evict input ``idx``; its slot stays with an empty unit."""
        info = self._inputs[idx]
        self.delete_file(info)
        info.unit = b""
        info.energy = 0.0
        info.needs_energy_update = False
        self._distribution_needs_update = True

    def add_rare_feature(self, idx: int) -> None:
        """Track ``idx`` as rare, evicting the most abundant rare features if needed."""
        freqs = self._global_feature_freqs
        while (
            len(self._rare_features) > self.entropic.number_of_rarest_features
            and self._freq_of_most_abundant_rare_feature
            > self.entropic.feature_frequency_threshold
        ):
            most = second = self._rare_features[0]
            delete = 0
            for i, candidate in enumerate(self._rare_features):
                if freqs.get(candidate, 0) >= freqs.get(most, 0):
                    second = most
                    most = candidate
                    delete = i

            self._rare_features[delete] = self._rare_features[-1]
            self._rare_features.pop()

            for info in self._inputs:
                if info.delete_feature_freq(most):
                    info.needs_energy_update = True

            self._freq_of_most_abundant_rare_feature = freqs.get(second, 0)

        self._rare_features.append(idx)
        freqs[idx] = 0
        for info in self._inputs:
            info.delete_feature_freq(idx)
            # Zero-energy inputs are never fuzzed and stay at zero.
            if info.energy > 0.0:
                info.sum_incidence += 1
                info.energy += math.log(info.sum_incidence) / info.sum_incidence

        self._distribution_needs_update = True

    def add_feature(self, idx: int, new_size: int, shrink: bool) -> bool:
        """Record that the next input to be added has feature ``idx`` at ``new_size``.

        Returns True if the feature is new, or smaller than before while shrinking.
        """
        if not new_size:
            raise ValueError("new_size must be positive")
        idx %= self.FEATURE_SET_SIZE
        old_size = self._input_sizes_per_feature.get(idx, 0)
        if old_size == 0 or (shrink and old_size > new_size):
            if old_size > 0:
                old_idx = self._smallest_element_per_feature[idx]
                info = self._inputs[old_idx]
                if info.num_features <= 0:
                    raise RuntimeError("feature owner has no features left")
                info.num_features -= 1
                if info.num_features == 0:
                    self.delete_input(old_idx)
            else:
                self._num_added_features += 1
                if self.entropic.enabled:
                    self.add_rare_feature(idx)
            self._num_updated_features += 1
            self._smallest_element_per_feature[idx] = len(self._inputs)
            self._input_sizes_per_feature[idx] = new_size
            return True
        return False

    def update_feature_frequency(self, info: Optional[InputInfo], idx: int) -> None:
        """Increment the global and local frequency of feature ``idx``."""
        idx %= self.FEATURE_SET_SIZE
        freq = self._global_feature_freqs.get(idx, 0)
        if freq == _U16_MAX:
            return
        self._global_feature_freqs[idx] = freq + 1

        if freq > self._freq_of_most_abundant_rare_feature or idx not in self._rare_features:
            return

        if freq == self._freq_of_most_abundant_rare_feature:
            self._freq_of_most_abundant_rare_feature = (
                self._freq_of_most_abundant_rare_feature + 1
            ) & _U16_MAX

        if info is not None:
            info.update_feature_frequency(idx)

    def num_features(self) -> int:
        return self._num_added_features

    def num_feature_updates(self) -> int:
        return self._num_updated_features

    def _update_corpus_distribution(self, rand: Random) -> None:
        # Local frequency changes trigger only occasional, random updates.
        if not self._distribution_needs_update and (
            not self.entropic.enabled or rand.below(self.SPARSE_ENERGY_UPDATES)
        ):
            return
        self._distribution_needs_update = False

        n = len(self._inputs)
        if not n:
            raise ValueError("the corpus is empty")
        average_time = sum(info.time_of_unit for info in self._inputs) // n

        weights = [0.0] * n
        vanilla = True
        if self.entropic.enabled:
            for info in self._inputs:
                if info.needs_energy_update and info.energy != 0.0:
                    info.needs_energy_update = False
                    info.update_energy(
                        len(self._rare_features),
                        self.entropic.scale_per_exec_time,
                        average_time,
                    )
            average_mutations = self._num_executed_mutations // n
            for i, info in enumerate(self._inputs):
                if info.num_features == 0:
                    weights[i] = 0.0
                elif info.num_executed_mutations // self.MAX_MUTATION_FACTOR > average_mutations:
                    weights[i] = 0.0
                else:
                    weights[i] = info.energy
                if weights[i] > 0.0:
                    vanilla = False

        if vanilla:
            weights = [
                float((i + 1) * (1000 if info.has_focus_function else 1))
                if info.num_features
                else 0.0
                for i, info in enumerate(self._inputs)
            ]

        cumulative = []
        total = 0.0
        last_positive = -1
        for i, weight in enumerate(weights):
            if weight > 0.0:
                total += weight
                last_positive = i
            cumulative.append(total)
        self._cumulative = cumulative
        self._total_weight = total
        self._last_positive = last_positive