# Copyright (c) Syntropy Systems
"""ladderlens command line interface."""
