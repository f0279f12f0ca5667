"""
Core domain models, curves, contracts and errors.

Building blocks independent of any content store or presentation layer.
"""
