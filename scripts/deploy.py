#!/usr/bin/env python3
"""
InsuranceClaim Contract Deployment Script

Compile the contracts first (npx hardhat compile), then run:
    DEPLOY_NETWORK=localhost python scripts/deploy.py
"""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from insurance_deploy.deploy import run

if __name__ == "__main__":
    sys.exit(run())
