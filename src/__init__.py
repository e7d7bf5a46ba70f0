"""ServerGuard: self-hosted image asset manager."""
