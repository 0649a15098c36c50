from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str
    ENV: str = "development"
    APP_VERSION: str = "1.0.0"

    # Token signing, must be set in .env
    JWT_SECRET: str
    JWT_ISSUER: str = "movie-catalog"
    JWT_AUDIENCE: str = "movie-catalog-clients"
    TOKEN_TTL_HOURS: int = 24
    BCRYPT_ROUNDS: int = 12

    CLOUD_NAME: str = ""
    PLACEHOLDER_IMAGE_URL: str = (
        "https://res.cloudinary.com/dvc85iwpj/image/upload/v1720247654/download_i0205y.png"
    )

    DB_QUERY_TIMEOUT: float = 3.0  # seconds per data access call
    MAX_BODY_BYTES: int = 1_048_576

    # Defaults for GET /v1/movies, overridable per request
    MOVIE_SEARCH_TERM: str = "the"
    MOVIE_PAGE_OFFSET: int = 1
    MOVIE_PAGE_LIMIT: int = 2
    LATEST_MOVIES_LIMIT: int = 5

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
