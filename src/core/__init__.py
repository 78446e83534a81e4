"""
Core domain models, mathematical primitives, contracts and configuration.

This module contains the foundational building blocks of the swap engine
that are independent of the price feed transport and the form layer.
"""
