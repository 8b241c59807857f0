"""Edition access: role-context resolution and permission evaluation for editions, companies, and users."""
