import uvicorn

from booking_service.app import create_app
from booking_service.config import BookingConfig, load_env_files


def main():
    load_env_files()
    config = BookingConfig()
    uvicorn.run(create_app(config), host=config.API_HOST, port=config.API_PORT)


if __name__ == "__main__":
    main()
