"""Hindley-Milner type inference for a small functional language."""

version = '0.1.0'
