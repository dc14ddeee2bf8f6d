"""ORM models registered on `scholarthynk.database.Base`."""
