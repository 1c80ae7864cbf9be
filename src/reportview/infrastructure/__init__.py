"""Infrastructure: isolated dispatch, JSON loading, wire codec, code fragments."""
