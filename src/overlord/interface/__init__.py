"""Terminal front end for Duck Overlord."""
