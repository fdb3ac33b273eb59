"""School blog REST API: teachers publish posts, students read them, both comment."""
