"""api/ -- FastAPI host exposing the login form over JSON."""
