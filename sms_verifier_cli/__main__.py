"""
Module execution entry point.

Allows running with: python -m sms_verifier_cli
"""

import sys
from sms_verifier_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
