"""Infrastructure adapters: persistence, security, audit, mail, logging."""
