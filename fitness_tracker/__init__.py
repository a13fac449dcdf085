"""Body measurement tracking and derived health metrics."""
