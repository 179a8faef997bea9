# Force SQLModel table registration at test discovery time
# This ensures all models are registered before any test database creation
import app.models  # noqa: F401
