APP_NAME = "buildinette"
ENV_PREFIX = "BUILDINETTE_CONFIG_"

MLX_DEFAULT_URL = "https://github.com/42paris/minilibx-linux.git"
