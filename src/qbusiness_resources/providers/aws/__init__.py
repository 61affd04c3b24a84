"""AWS provider: boto3 client construction and QBusiness resource definitions."""
