"""Entry point: python -m rss_batch"""
import sys

from rss_batch.cli import main

sys.exit(main())
