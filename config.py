"""
Build-time configuration for the site translator.

Everything the run needs is fixed here: the published domain, the brand
token that must never be translated, where the source edition lives and
where locale trees are written, and how documents are localized.
"""
from __future__ import annotations

import logging

SITE_CONFIG = {
    'domain': 'evaluating.tools',
    'brand_token': 'evaluating.tools',
    'copyright_symbol': '©',
    'source_locale': 'en',
    'index_name': 'index.html',
}

PATH_CONFIG = {
    'input_root': './en',
    'output_root': './',
    'languages_file': './languages.json',
}

TRANSFORM_CONFIG = {
    'parser': 'html.parser',
    'selectors': ['h1', 'h2', 'h3', 'h4', 'h5', 'h6', 'span', 'a', 'button', 'p', 'label', 'option', 'div'],
    # "text_nodes" keeps nested markup; "whole" replaces the full text content
    'text_mode': 'text_nodes',
    # "element" uses text_mode for anchors too; "whole" always replaces anchor text
    'anchor_mode': 'element',
    # selected elements inside these tags are left untouched
    'skip_tags': ['script', 'style', 'code', 'pre', 'math', 'svg', 'noscript'],
    'translate_title': True,
    'meta_translate': [
        ('name', 'title'),
        ('name', 'description'),
        ('property', 'og:title'),
        ('property', 'og:description'),
    ],
    'meta_url': [
        ('property', 'og:url'),
    ],
    'write_source_alternates': False,
}

LOGGING_CONFIG = {
    'level': logging.INFO,
    'format': '%(asctime)s %(levelname)s %(message)s',
    'datefmt': '%H:%M:%S',
    'log_file': None,
    'verbose': True,
}
