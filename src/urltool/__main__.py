#!/usr/bin/env python3
"""
Entry point for running urltool as a module.
This allows: python -m urltool <url>... [modifier...]
"""

from .cli import run

if __name__ == "__main__":
    run()
