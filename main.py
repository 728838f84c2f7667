#!/usr/bin/env python3
"""
Main entry point for the basic IRC client

Usage: main.py <host> <port> <nick> <channel>
"""

import sys

from basicirc.cli import main

if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
