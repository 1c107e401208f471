"""umami_load.user: the virtual user and the form submission it posts."""
