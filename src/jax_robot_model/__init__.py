"""
JAX Robot Model: the in-memory kinematic model of a robot description editor.

This library provides entity builders, a structural validator for the
kinematic tree, a jit-compatible coordinate-transform library and an inertia
tensor solver used to visualize equivalent inertia boxes.
"""

import jax
jax.config.update("jax_enable_x64", True)

# Import core modules
from . import core
from . import transforms
from . import inertia
from . import chain

__version__ = "0.1.0"
__all__ = ["core", "transforms", "inertia", "chain"]
