"""BlogBliss - blogging backend with posts, accounts and media assets."""

__version__ = "1.0.0"
