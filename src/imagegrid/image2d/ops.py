"""Channelwise arithmetic kernels shared by pixels and image buffers.

The kernels take two arrays of identical shape and dtype and return a new
array of that dtype.  Integer semantics follow fixed-width machine
arithmetic: overflow wraps, ``/`` truncates toward zero, ``%`` keeps the
sign of the dividend, and dividing by zero raises ``ZeroDivisionError``.
"""

from __future__ import annotations

from typing import Callable

import numpy as np

Kernel = Callable[[np.ndarray, np.ndarray], np.ndarray]


def _is_integer(arr: np.ndarray) -> bool:
    return np.issubdtype(arr.dtype, np.integer)


def _check_divisor(rhs: np.ndarray) -> None:
    if np.any(rhs == 0):
        raise ZeroDivisionError("integer division or remainder by zero")


def add(lhs: np.ndarray, rhs: np.ndarray) -> np.ndarray:
    return np.add(lhs, rhs, dtype=lhs.dtype)


def sub(lhs: np.ndarray, rhs: np.ndarray) -> np.ndarray:
    return np.subtract(lhs, rhs, dtype=lhs.dtype)


def mul(lhs: np.ndarray, rhs: np.ndarray) -> np.ndarray:
    return np.multiply(lhs, rhs, dtype=lhs.dtype)


def div(lhs: np.ndarray, rhs: np.ndarray) -> np.ndarray:
    if _is_integer(lhs):
        _check_divisor(rhs)
        # lhs - fmod(lhs, rhs) is an exact multiple of rhs
        return np.floor_divide(lhs - np.fmod(lhs, rhs), rhs, dtype=lhs.dtype)
    return np.true_divide(lhs, rhs, dtype=lhs.dtype)


def rem(lhs: np.ndarray, rhs: np.ndarray) -> np.ndarray:
    if _is_integer(lhs):
        _check_divisor(rhs)
    return np.fmod(lhs, rhs, dtype=lhs.dtype)


KERNELS: dict[str, Kernel] = {
    "add": add,
    "sub": sub,
    "mul": mul,
    "div": div,
    "rem": rem,
}


def apply_binary(op: str, lhs: np.ndarray, rhs: np.ndarray) -> np.ndarray:
    """Apply the kernel named *op* to two same-shaped arrays."""
    kernel = KERNELS.get(op)
    if kernel is None:
        raise KeyError(f"Unknown arithmetic op: {op}")
    if lhs.shape != rhs.shape:
        raise ValueError(f"Operand shapes differ: {lhs.shape} vs {rhs.shape}")
    if lhs.dtype != rhs.dtype:
        raise TypeError(f"Operand dtypes differ: {lhs.dtype} vs {rhs.dtype}")
    return kernel(lhs, rhs)
