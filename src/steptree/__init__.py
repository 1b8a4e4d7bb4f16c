"""Step-indexed tree builder with linear step playback."""
