import random
from pathlib import Path
from typing import Iterable, List, Optional, Tuple


# built-in dictionary used when WORDS_FILE is not configured
WORDS = [
    "cat", "dog", "sun", "map", "key", "owl", "fig", "jam", "ice", "box",
    "bird", "fish", "tree", "lamp", "rope", "wolf", "moon", "star", "kite", "door",
    "apple", "bread", "chair", "cloud", "grape", "house", "lemon", "river", "stone", "tiger",
    "button", "candle", "forest", "garden", "island", "jungle", "market", "pencil", "rabbit", "window",
    "balloon", "blanket", "chicken", "diamond", "dolphin", "freedom", "kitchen", "monster", "picture", "thunder",
    "airplane", "bathroom", "calendar", "dinosaur", "elephant", "hospital", "mountain", "notebook", "sandwich", "umbrella",
    "adventure", "butterfly", "chocolate", "crocodile", "detective", "fireplace", "lighthouse", "newspaper", "pineapple", "telescope",
    "basketball", "blackboard", "helicopter", "microscope", "strawberry", "watermelon", "skateboard", "toothbrush", "motorcycle", "playground",
]


class Dictionary:
    """Static list of candidate secret words."""

    def __init__(self, words: Iterable[str]):
        self.words: List[str] = [w for w in words if w]
        if not self.words:
            raise ValueError("Word list cannot be empty")

    def length_bounds(self) -> Tuple[int, int]:
        lengths = [len(w) for w in self.words]
        return min(lengths), max(lengths)

    def of_length(self, length: int) -> List[str]:
        return [w for w in self.words if len(w) == length]

    def pick(self, length: int, rng=None) -> Optional[str]:
        """Uniformly pick a word of exactly ``length`` letters.

        Returns None when the dictionary has no word of that length.
        """
        candidates = self.of_length(length)
        if not candidates:
            return None
        return (rng or random).choice(candidates)


def load_words(path: str) -> List[str]:
    # one word per line; blank lines and '#' comments are skipped
    text = Path(path).read_text(encoding="utf-8")
    words = []
    for line in text.splitlines():
        line = line.strip()
        if line and not line.startswith("#"):
            words.append(line)
    return words


def default_dictionary(path: Optional[str] = None) -> Dictionary:
    if path:
        return Dictionary(load_words(path))
    return Dictionary(WORDS)
