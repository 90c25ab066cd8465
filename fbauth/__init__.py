"""Facebook OAuth 2.0 authorization code flow."""
