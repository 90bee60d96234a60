# -*- coding: utf-8 -*-
"""Configuration — settings built from CLI options, environment and .env."""
