"""finbuddy - a personal finance tracker backed by plain text files."""
