# -*- coding: utf-8 -*-
"""External API clients (Storyblok Management API, Gemini)."""
