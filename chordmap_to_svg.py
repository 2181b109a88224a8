#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Render a chordmap listing as a printable cheat sheet.
"""

# local repo modules
import chordmap_cheatsheet.cli


if __name__ == "__main__":
	chordmap_cheatsheet.cli.main()
