"""Domain layer: grants, payments and the access coordinator."""
