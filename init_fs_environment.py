# init_fs_environment.py
"""Create a sample target tree and mount point for trying out passthroughfs.

    python init_fs_environment.py
    passthroughfs ./mnt/all-projects --target ./nfs
"""

import os

# Define directory structure
base_dirs = {
    "nfs": ["notes.txt"],
    "nfs/project-1": ["main.py", "common-lib.py"],
    "nfs/project-2": ["entrypoint.py", "common-lib.py"],
}

# Sample content for the test files
sample_content = {
    "notes.txt": "hi\n",
    "main.py": 'print("Hello from main.py in project-1")\n',
    "entrypoint.py": 'print("Starting project-2 entrypoint")\n',
    "common-lib.py": 'def util(): return "Shared util function"\n',
}

MOUNTPOINT = os.path.join("mnt", "all-projects")


def build_environment(base="."):
    """Write the sample tree under ``base``; return (target, mountpoint)."""
    for dir_path, files in base_dirs.items():
        os.makedirs(os.path.join(base, dir_path), exist_ok=True)
        for file_name in files:
            full_path = os.path.join(base, dir_path, file_name)
            with open(full_path, "w") as f:
                f.write(sample_content[file_name])

    mountpoint = os.path.join(base, MOUNTPOINT)
    os.makedirs(mountpoint, exist_ok=True)
    return os.path.join(base, "nfs"), mountpoint


if __name__ == "__main__":
    target, mountpoint = build_environment()
    print(f"Directory structure and test files created under {target}")
    print(f"Mount point ready: passthroughfs {mountpoint} --target {target}")
