"""Mapping with case-insensitive string keys.

Keys are stored under their ``str.casefold()`` form, so ``"GPU"``, ``"gpu"``
and ``"Gpu"`` address the same entry. The original spelling of the most
recent write is kept for iteration and ``repr``.
"""
from __future__ import annotations

from typing import Dict, Iterable, Iterator, Mapping, MutableMapping, Tuple, TypeVar

V = TypeVar("V")


def fold_key(key: str) -> str:
    if not isinstance(key, str):
        raise TypeError(f"keys must be str, not {type(key).__name__}")
    return key.casefold()


class CaseInsensitiveDict(MutableMapping[str, V]):
    """Dict-like container that folds string keys on every operation.

    Setting a key that differs only by case replaces the existing entry and
    its remembered spelling. Equality against another mapping compares the
    folded keys, so ``{"GPU": 1}`` equals a map holding ``{"gpu": 1}``.
    Non-string keys raise ``TypeError`` on write and are never contained.
    """

    def __init__(self, data: Mapping[str, V] | Iterable[Tuple[str, V]] | None = None, **kwargs: V) -> None:
        self._store: Dict[str, Tuple[str, V]] = {}
        if data is not None:
            self.update(data)
        if kwargs:
            self.update(kwargs)

    def __getitem__(self, key: str) -> V:
        return self._store[fold_key(key)][1]

    def __setitem__(self, key: str, value: V) -> None:
        self._store[fold_key(key)] = (key, value)

    def __delitem__(self, key: str) -> None:
        del self._store[fold_key(key)]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.casefold() in self._store

    def __iter__(self) -> Iterator[str]:
        return (original for original, _ in self._store.values())

    def __len__(self) -> int:
        return len(self._store)

    def folded_items(self) -> Iterator[Tuple[str, V]]:
        """Items keyed by the normalized form."""
        return ((folded, value) for folded, (_, value) in self._store.items())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mapping):
            return NotImplemented
        try:
            other_folded = CaseInsensitiveDict(other)
        except TypeError:
            return False
        return dict(self.folded_items()) == dict(other_folded.folded_items())

    __hash__ = None  # type: ignore[assignment]

    def copy(self) -> "CaseInsensitiveDict[V]":
        return CaseInsensitiveDict(self._store.values())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self.items())!r})"
