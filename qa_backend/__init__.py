"""Q&A service backend: sign-up, sign-in, sign-out and token-guarded content creation."""
