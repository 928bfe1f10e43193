"""VRChive Searcher - find resource links in exported chat transcripts."""

__version__ = "0.1.0"
