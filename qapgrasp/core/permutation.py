"""
Permutation value type with a paired inverse.

``order[p]`` is the element at position ``p`` and ``where[e]`` is the position
of element ``e``. Both arrays are updated together by every mutation, so the
bijection cannot be broken through the public methods.
"""
from __future__ import annotations

import numpy as np


class Permutation:

    __slots__ = ("_order", "_where")

    def __init__(self, order):
        order = np.asarray(order, dtype=np.int64)
        if order.ndim != 1:
            raise ValueError("a permutation must be one-dimensional")
        where = np.full(len(order), -1, dtype=np.int64)
        for pos, elem in enumerate(order):
            if not 0 <= elem < len(order) or where[elem] != -1:
                raise ValueError(f"not a permutation of 0..{len(order) - 1}: {order.tolist()}")
            where[elem] = pos
        self._order = order.copy()
        self._where = where

    @classmethod
    def identity(cls, n: int) -> "Permutation":
        perm = cls.__new__(cls)
        perm._order = np.arange(n, dtype=np.int64)
        perm._where = np.arange(n, dtype=np.int64)
        return perm

    @property
    def order(self) -> np.ndarray:
        """Position -> element (read-only view)."""
        view = self._order.view()
        view.flags.writeable = False
        return view

    @property
    def where(self) -> np.ndarray:
        """Element -> position (read-only view)."""
        view = self._where.view()
        view.flags.writeable = False
        return view

    def __len__(self) -> int:
        return len(self._order)

    def __getitem__(self, pos):
        return self._order[pos]

    def __iter__(self):
        return iter(self._order.tolist())

    def __eq__(self, other) -> bool:
        if not isinstance(other, Permutation):
            return NotImplemented
        return np.array_equal(self._order, other._order)

    def __repr__(self) -> str:
        return f"Permutation({self._order.tolist()})"

    def copy(self) -> "Permutation":
        perm = Permutation.__new__(Permutation)
        perm._order = self._order.copy()
        perm._where = self._where.copy()
        return perm

    def swap(self, p: int, q: int) -> None:
        """Exchange the elements at positions ``p`` and ``q``."""
        ep, eq = self._order[p], self._order[q]
        self._order[p], self._order[q] = eq, ep
        self._where[ep], self._where[eq] = q, p

    def place(self, elem: int, pos: int) -> None:
        """Move ``elem`` to ``pos``, sending the previous occupant to the vacated slot."""
        self.swap(self._where[elem], pos)

    def inverse(self) -> "Permutation":
        perm = Permutation.__new__(Permutation)
        perm._order = self._where.copy()
        perm._where = self._order.copy()
        return perm

    def is_valid(self) -> bool:
        n = len(self._order)
        if sorted(self._order.tolist()) != list(range(n)):
            return False
        return bool(np.array_equal(self._where[self._order], np.arange(n)))
