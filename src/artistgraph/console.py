"""
console.py

Progress output shared by every pipeline stage.
"""

from __future__ import annotations


def status(message: str) -> None:
    print(f"⏳ {message}")


def done(message: str) -> None:
    print(f"✅ {message}")


def warn(message: str) -> None:
    print(f"⚠️ {message}")
