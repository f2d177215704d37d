"""siteredirect - Redirect every page of a built site to a new host."""
