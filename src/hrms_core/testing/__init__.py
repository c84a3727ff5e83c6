"""Testing support – fakes for the cache, scheduler and services."""
