"""HTTP surface: page routes, form commands and the JSON matching API."""
