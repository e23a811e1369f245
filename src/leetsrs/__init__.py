"""leetsrs: spaced-repetition tracker for coding-interview practice."""

from leetsrs.consts import VERSION

__version__ = VERSION
