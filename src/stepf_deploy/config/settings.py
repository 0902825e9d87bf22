from dynaconf import Dynaconf

# Load configuration
settings = Dynaconf(
    settings_files=["stepf_config.json"],
    environments=True,
    env_switcher="STEPF_ENV",
    envvar_prefix="STEPF",
    load_dotenv=True,
)
