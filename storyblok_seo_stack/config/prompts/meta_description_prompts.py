# -*- coding: utf-8 -*-
"""
Meta Description Prompts
=========================
Prompt templates for the Meta Description Agent that summarizes the text
of a Storyblok story into an SEO meta description.
"""

META_DESCRIPTION_SYSTEM_PROMPT = (
    "You are a text analyst. Your goal is to generate a short summary of this "
    "text suitable for the meta description of a website and output the result "
    "in the following language: {language}. "
    "Limit the output to {max_characters} characters."
)

META_DESCRIPTION_USER_INSTRUCTION = (
    "Follow the instructions and rules provided in the system instruction."
)
