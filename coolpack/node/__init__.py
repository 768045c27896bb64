"""Reading package.json and detecting package managers, frameworks and native dependencies."""