"""credit: edit and export merged PRs and closed issues."""
