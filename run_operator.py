#!/usr/bin/env python3
"""
Wrapper script to run the weblogic-operator.

Configuration comes from the environment (or a .env file, see ENV_FILE).

Usage:
    python run_operator.py

Examples:
    WATCH_NAMESPACE=my-namespace VERBOSE=true python run_operator.py
"""

from weblogic.app import main

if __name__ == '__main__':
    main()
