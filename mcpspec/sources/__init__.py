"""Sources — where prompt context comes from (git hosting raw content)."""
