"""Services - book operations behind the HTTP routes."""
