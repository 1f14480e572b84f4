from setuptools import setup

setup(
    name = "battlog",
    version = "1.0.0",
    description = "A periodic battery telemetry logger for Linux operating systems",
    license = "GPLv3",
    packages=['battlog'],
    entry_points = {
        'console_scripts' : ['battlog = battlog.battlog:main']
    },
    classifiers=[
        "License :: OSI Approved :: GNU General Public License v3 (GPLv3)",
        "Operating System :: POSIX :: Linux",
    ],
    python_requires=">=3.7",
    install_requires=[
        "setuptools",
        "psutil",
        "rich",
    ],
)
