"""Translate yabai/skhd configuration text to and from a validated structured model."""

import logging

logging.basicConfig(format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)
