"""
Entry point for BatchNote

Run this script from a source checkout:
    python run.py compose shot.png "::Looks good" -o out.png
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

# Import and run main
from batch_note.main import main

if __name__ == "__main__":
    main()
