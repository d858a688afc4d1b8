"""
KanaDrill - Hiragana drill trainer.

Quiz session engine for a fixed kana -> romaji vocabulary, with
category, custom and review-mistakes practice modes.
"""

__version__ = "0.1.0"
