"""Toast engine runtime implementations."""
