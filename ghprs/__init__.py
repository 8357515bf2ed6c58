"""ghprs: open pull requests of a GitHub organization, with mergeability and
staleness."""
