"""Building blocks of a coverage-guided fuzzer: corpus, dictionaries, bitmaps and traces."""

__version__ = "0.1.0"

__all__ = [
    "bitmap",
    "bits",
    "command",
    "corpus",
    "dataflow",
    "dictionary",
    "options",
    "rng",
    "standalone",
]