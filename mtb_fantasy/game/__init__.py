"""Pure game rules: hashing, scoring, pricing and ranking."""
