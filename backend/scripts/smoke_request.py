"""Run a quick request against the app without starting a server.

Logs in with the demo credentials created by `seed_demo.py` and prints
the account and the visible departments.
Usage: python scripts/smoke_request.py [--login LOGIN] [--password PASSWORD]
"""

import sys
import os
import argparse

# Ensure backend folder is on sys.path so `academia` package can be imported
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from fastapi.testclient import TestClient
from academia.main import app


def run(login: str, password: str):
    with TestClient(app) as client:
        resp = client.get('/health')
        print('HEALTH:', resp.status_code, resp.json())
        resp = client.post('/api/authenticate', json={'username': login, 'password': password})
        print('AUTHENTICATE:', resp.status_code)
        if resp.status_code != 200:
            print('CONTENT:', resp.text)
            return
        headers = {'Authorization': f"Bearer {resp.json()['id_token']}"}
        print('ACCOUNT:', client.get('/api/account', headers=headers).json())
        print('DEPARTAMENTOS:', client.get('/api/departamentos', headers=headers).json())


if __name__ == '__main__':
    parser = argparse.ArgumentParser()
    parser.add_argument('--login', default='admdpto')
    parser.add_argument('--password', default='demo')
    args = parser.parse_args()
    run(args.login, args.password)
