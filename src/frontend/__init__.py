"""Flask JSON host for the mention engine (see frontend.web)."""
