from __future__ import annotations

import json
import weakref
from pathlib import Path
from typing import Iterable, Iterator


class TrieNode:
    __slots__ = ("value", "children", "is_terminating", "_parent", "__weakref__")

    def __init__(self, value: str | None = None, parent: TrieNode | None = None):
        self.value = value
        self.children: dict[str, TrieNode] = {}
        self.is_terminating: bool = False
        self._parent = weakref.ref(parent) if parent is not None else None

    @property
    def parent(self) -> TrieNode | None:
        return self._parent() if self._parent is not None else None

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def add_child(self, value: str) -> TrieNode:
        child = self.children.get(value)
        if child is None:
            child = TrieNode(value, self)
            self.children[value] = child
        return child


class Trie:
    """Case-insensitive prefix tree with word counting and pruning removal."""

    def __init__(self):
        self.root = TrieNode()
        self._word_count = 0

    @classmethod
    def from_words(cls, words: Iterable[str]) -> Trie:
        trie = cls()
        for w in words:
            trie.insert(w)
        return trie

    @property
    def count(self) -> int:
        return self._word_count

    @property
    def is_empty(self) -> bool:
        return self._word_count == 0

    def __len__(self) -> int:
        return self._word_count

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.contains(word)

    def __iter__(self) -> Iterator[str]:
        return self._walk(self.root, "")

    def insert(self, word: str):
        if not word:
            return
        node = self.root
        for ch in word.lower():
            node = node.add_child(ch)
        if not node.is_terminating:
            node.is_terminating = True
            self._word_count += 1

    def contains(self, word: str) -> bool:
        if not word:
            return False
        node = self._find_last_node(word)
        return node is not None and node.is_terminating

    def remove(self, word: str) -> bool:
        """Remove a word, pruning nodes that no longer lead to any word.

        A terminal node with children only loses its flag. A terminal leaf is
        detached, and so is every ancestor above it until one is reached that
        still has other children or spells a shorter word itself.
        Returns True if the word was present.
        """
        if not word:
            return False
        node = self._find_last_node(word)
        if node is None or not node.is_terminating:
            return False

        node.is_terminating = False
        parent = node.parent
        while node.is_leaf and parent is not None:
            del parent.children[node.value]
            if parent.is_terminating:
                break
            node, parent = parent, parent.parent

        self._word_count -= 1
        return True

    def find_words_with_prefix(self, prefix: str) -> list[str]:
        prefix = prefix.lower()
        node = self._find_last_node(prefix)
        if node is None:
            return []
        return list(self._walk(node, prefix))

    @property
    def words(self) -> list[str]:
        return list(self._walk(self.root, ""))

    def _find_last_node(self, word: str) -> TrieNode | None:
        node = self.root
        for ch in word.lower():
            node = node.children.get(ch)
            if node is None:
                return None
        return node

    @staticmethod
    def _walk(start: TrieNode, prefix: str) -> Iterator[str]:
        # Pre-order with an explicit stack; children pushed reversed to keep insertion order.
        stack = [(start, prefix)]
        while stack:
            node, path = stack.pop()
            if node.is_terminating:
                yield path
            for ch, child in reversed(node.children.items()):
                stack.append((child, path + ch))

    # Persistence: the word list is the whole contract, structure is rebuilt on load.

    def to_dict(self) -> dict:
        return {"words": self.words}

    @classmethod
    def from_dict(cls, data: dict) -> Trie:
        return cls.from_words(data.get("words", []))

    def dump(self, path: str | Path):
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path: str | Path) -> Trie:
        with open(path, "r", encoding="utf-8") as f:
            return cls.from_dict(json.load(f))
