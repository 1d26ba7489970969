"""Setup for Rytmo.

Install for development:
    pip install -e ".[test]"

Build a macOS .app bundle:
    pip install py2app
    python setup.py py2app
"""

from setuptools import setup, find_packages

APP = ["main.py"]
DATA_FILES = []
OPTIONS = {
    "argv_emulation": False,
    "iconfile": None,
    "plist": {
        "CFBundleName": "Rytmo",
        "CFBundleDisplayName": "Rytmo",
        "CFBundleIdentifier": "com.rytmo.app",
        "CFBundleVersion": "0.1.0",
        "CFBundleShortVersionString": "0.1.0",
        "NSHighResolutionCapable": True,
        "LSMinimumSystemVersion": "13.0",
        "LSUIElement": True,  # menu-bar only, no Dock icon
    },
}

setup(
    app=APP,
    data_files=DATA_FILES,
    options={"py2app": OPTIONS},
    name="rytmo",
    version="0.1.0",
    description="Menu-bar Pomodoro timer with drift-corrected countdown",
    python_requires=">=3.10",
    packages=find_packages(include=["rytmo", "rytmo.*"]),
    install_requires=[
        "PyQt6>=6.5",
        "numpy>=1.24",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "gui_scripts": ["rytmo = rytmo.__main__:main"],
    },
)
