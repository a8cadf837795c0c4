#!/usr/bin/env python3
"""Run the meal planner API."""

import sys
import os

# Add package to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from mealprep.main import run

if __name__ == "__main__":
    run()
