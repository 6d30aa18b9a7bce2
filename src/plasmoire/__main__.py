"""
Run with: python -m plasmoire
"""
import sys

from plasmoire.main import main

if __name__ == "__main__":
    sys.exit(main())
