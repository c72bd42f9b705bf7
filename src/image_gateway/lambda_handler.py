"""Lambda handler for the Image Gateway using Mangum."""
from mangum import Mangum
from image_gateway.main import create_app

# Create FastAPI app
app = create_app()

# Wrap with Mangum for Lambda compatibility
handler = Mangum(app, lifespan="off")

# Export handler for Lambda runtime
lambda_handler = handler
