"""Gallery photo listing: cache, query planning and record helpers."""
