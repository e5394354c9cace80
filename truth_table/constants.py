app_configuration_values = {
    "program_name": "truth-table",
    # 2**20 rows is already more than anyone will read
    "max_variables": 20,
}


class AppConfiguration:
    def __init__(self, config):
        self._config = config

    def __getitem__(self, key):
        return self._config[key]

    def __repr__(self):
        return str(self._config)


app_configuration = AppConfiguration(app_configuration_values)
