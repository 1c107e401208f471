"""umami_load.tasks: page visit engine and the flows built on it."""
