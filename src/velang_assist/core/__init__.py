"""Cross-cutting infrastructure shared by hosts."""
