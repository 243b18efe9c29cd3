"""Host-side steps: preflight checks, source fetch, compose build and launch."""
