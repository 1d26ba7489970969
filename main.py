#!/usr/bin/env python3
"""Rytmo — entry point.

Run with:
    python main.py
    python -m rytmo
"""

from rytmo.__main__ import main


if __name__ == "__main__":
    main()
