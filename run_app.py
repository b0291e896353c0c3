"""
SmartForm browser UI entry point.

Usage:
    python run_app.py
    # Then open http://localhost:7860

    # Point it at another form API
    SMARTFORM_BACKEND_URL=https://forms.example.com python run_app.py
"""

import sys
from pathlib import Path

# Add src to path for local development
sys.path.insert(0, str(Path(__file__).parent / "src"))

from smartform.ui import main

if __name__ == "__main__":
    main()
