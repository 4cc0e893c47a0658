"""gifvote: Giphy proxy that caches GIFs per topic and ranks them by votes."""

__version__ = "0.1.0"
