"""Terminal-free building blocks of the worklist editor."""
