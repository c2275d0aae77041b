from pydantic_settings import BaseSettings, SettingsConfigDict

CONFIG_XML_LOCATION = "conf/config.xml"
PROPERTIES_LOCATION = "mqttMessageLog.properties"
XML_ROOT = "hivemq-mqtt-message-log-extension"


class Settings(BaseSettings):
    # Extension
    extension_home: str = "."

    # Logging
    log_level: str = "INFO"
    log_dir: str = "logs"
    log_json: bool = False
    message_logger: str = "mqttlog.messages"

    model_config = SettingsConfigDict(env_prefix="MQTTLOG_", env_file=".env", extra="ignore")


settings = Settings()
