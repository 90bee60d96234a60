# -*- coding: utf-8 -*-
"""
Pipeline package — per-story update pipeline and the CLI entry point.
The CLI logs progress to stderr and prints a JSON run summary to stdout.
"""
