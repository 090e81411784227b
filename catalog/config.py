"""Configuration management."""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Config:
    """Application configuration."""
    
    # API
    LIBRARY_API_URL = os.getenv("LIBRARY_API_URL", "http://localhost:8080/api/v1").rstrip("/")
    
    # Defaults
    DEFAULT_TIMEOUT = int(os.getenv("DEFAULT_TIMEOUT", "10"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING").upper()
    
    @property
    def HEALTH_URL(self):
        """Build the health check URL on the service root."""
        root = self.LIBRARY_API_URL
        if root.endswith("/api/v1"):
            root = root[: -len("/api/v1")]
        return f"{root}/health"
