"""PFM vendor API simulator: alert evaluation and live-data migration."""
