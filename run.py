"""
Entry Point Script (Bootstrap)
==============================
Development runner that works without installing the package.

It is located outside the 'src' package and puts 'src' on sys.path so that
'from plasmoire...' resolves from a plain checkout.

Usage:
    $ python run.py [--debug] [--log-file plasmoire.log]
"""
import os
import sys

current_dir: str = os.path.dirname(os.path.abspath(__file__))
src_path: str = os.path.join(current_dir, 'src')
sys.path.insert(0, src_path)

from plasmoire.main import main

if __name__ == "__main__":
    sys.exit(main())
