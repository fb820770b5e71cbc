# fuel_regression/utils/tensor_scope.py
from __future__ import annotations

from typing import List, TypeVar

import numpy as np
import torch

from fuel_regression.utils.logger import logs

T = TypeVar("T")


def free_buffer(buf: object) -> int:
    """
    Drop the memory behind `buf` in place, whoever else still references it.
    Returns the bytes freed (0 for buffers that do not own their memory).

    - torch.Tensor: storage resized to 0 (only resizable storages,
      i.e. not the ones shared with numpy)
    - np.ndarray: resized to 0 when it owns its data
    """
    if isinstance(buf, torch.Tensor):
        storage = buf.untyped_storage()
        if not storage.resizable():
            return 0
        nbytes = storage.nbytes()
        storage.resize_(0)
        return nbytes

    if isinstance(buf, np.ndarray):
        if not buf.flags.owndata or not buf.flags.c_contiguous:
            return 0
        nbytes = buf.nbytes
        buf.resize(0, refcheck=False)
        return nbytes

    return 0


class TensorScope:
    """
    TensorScope（FINAL）

    Scoped ownership of a stage's intermediate numeric buffers.

        with TensorScope("normalize") as scope:
            x = scope.track(torch.as_tensor(...))
            ...
            return scope.keep(result)

    Contract:
    - every tracked buffer is FREED on exit, including on exceptions;
      a stale reference sees an empty buffer afterwards
    - kept buffers escape the scope and belong to the caller
    - a closed scope refuses new buffers
    """

    def __init__(self, name: str):
        self.name = name
        self._live: List[object] = []
        self._closed = False
        self.freed_bytes = 0

    @property
    def live(self) -> int:
        return len(self._live)

    @property
    def closed(self) -> bool:
        return self._closed

    def track(self, buf: T) -> T:
        if self._closed:
            raise RuntimeError(f"[TensorScope] {self.name} already closed")
        self._live.append(buf)
        return buf

    def keep(self, buf: T) -> T:
        self._live = [b for b in self._live if b is not buf]
        return buf

    def release(self) -> int:
        released = len(self._live)
        for buf in self._live:
            self.freed_bytes += free_buffer(buf)
        self._live.clear()
        self._closed = True
        return released

    def __enter__(self) -> "TensorScope":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        released = self.release()
        logs.debug(
            f"[TensorScope] {self.name} released={released} freed_bytes={self.freed_bytes}"
        )
