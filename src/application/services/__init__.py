"""Application services shared by command and query handlers."""
