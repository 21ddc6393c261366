"""Foundation layer: errors, outcomes and configuration."""
