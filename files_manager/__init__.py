"""Files Manager: token-authenticated file and folder storage API."""
