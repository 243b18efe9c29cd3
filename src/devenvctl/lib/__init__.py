"""Service layer shared by the devenvctl command-line entry points."""
