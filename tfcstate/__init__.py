"""tfcstate - pull and push Terraform Cloud state files by workspace name."""

__version__ = "0.1.0"
