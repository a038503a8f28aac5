"""MongoDB access: client bootstrap, document models and repositories."""
