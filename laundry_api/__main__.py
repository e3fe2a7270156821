from laundry_api.main import run

run()
