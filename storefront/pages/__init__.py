"""Read-path page loaders returning JSON view models."""
