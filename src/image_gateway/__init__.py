"""Image Gateway: authenticated multipart image uploads relayed to S3."""
