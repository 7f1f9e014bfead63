"""
Entry Point Script (Bootstrap)
==============================
Runs the command line interface from a source checkout without installing.

Why is this file needed?
------------------------
1. It is located outside the 'src' package to act as a convenient runner.
2. It modifies 'sys.path' so that 'from sincfilter...' resolves to ./src.

Usage:
    $ python run.py movie.h5 --half-width 10 --cutoff 0.2
"""
import sys
import os

# Add the 'src' directory to the Python path
current_dir: str = os.path.dirname(os.path.abspath(__file__))
src_path: str = os.path.join(current_dir, 'src')
sys.path.insert(0, src_path)

from sincfilter.cli import main

if __name__ == "__main__":
    sys.exit(main())
