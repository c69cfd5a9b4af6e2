"""Internal helpers shared by the container algebras and the matching engine."""
