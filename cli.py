# cli.py

"""
Launcher for running SiteCrawl from a source checkout.

Example:
    python cli.py https://example.com 5 50 --output reports/example.csv
"""
from sitecrawl.cli import main

if __name__ == "__main__":
    main()
