# -*- coding: utf-8 -*-
"""Prompt templates for the generation agents."""
