# -*- coding: utf-8 -*-
"""
Storyblok SEO stack — generates meta descriptions for Storyblok stories
from their content using Gemini.
"""

__version__ = "1.0.0"
