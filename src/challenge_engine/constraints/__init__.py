"""Challenge constraint checks, discovered by ConstraintRegistry."""
