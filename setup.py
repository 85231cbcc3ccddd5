import setuptools

setuptools.setup(name="spotify-uri",
                 version="0.1.0",
                 description="Spotify ID and URI codec",
                 long_description=open("README.md").read(),
                 long_description_content_type="text/markdown",
                 license="Apache-2.0",
                 packages=setuptools.find_packages(".", include=["spotify_uri", "spotify_uri.*"]),
                 install_requires=open("requirements.txt").read().splitlines(),
                 extras_require={"test": ["pytest>=7.0"]},
                 python_requires=">=3.8",
                 classifiers=[
                     "Development Status :: 3 - Alpha",
                     "License :: OSI Approved :: Apache Software License",
                     "Topic :: Multimedia :: Sound/Audio"
                 ])
