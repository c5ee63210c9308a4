# app/config.py

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    CATALOG_PATH: str = "db.json"      # файл каталога (goods, categories, colors)
    ORDERS_PATH: str = "order.json"    # файл журнала заказов
    IMG_DIR: str = "."                 # корень для /img/*

    CATALOG_RELOAD: bool = False       # перечитывать каталог на каждый запрос
    GOODS_STRICT_PARAMS: bool = True   # отклонять неизвестные параметры /api/goods

    HOST: str = "127.0.0.1"
    PORT: int = 8024

    LOG_DIR: str = "app/log"
    LOG_PRINT: str = "1"

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore"
    )

settings = Settings()
