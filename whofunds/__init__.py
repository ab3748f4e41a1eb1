"""Who Funds Them - top campaign donors for U.S. politicians from OpenFEC."""

__version__ = "0.1.0"
