"""Pure helpers - projection math, slugs and timing."""
