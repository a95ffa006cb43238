"""Точка входа в оконное приложение."""
from image_merger.app import ImageMergerApp
from image_merger.config import configure_logging


def main() -> None:
    """Создаёт и запускает главное окно приложения."""
    configure_logging()
    app = ImageMergerApp()
    app.mainloop()


if __name__ == "__main__":
    main()
